"""Labeler services: label policy, update-request comments, and the run orchestrator."""

from update_labeler.services.labeler.comments import render_update_comment
from update_labeler.services.labeler.orchestrator import (
    LabelRunReport,
    UpdateLabeler,
    run_update_labeler,
)
from update_labeler.services.labeler.policy import LabelAction, LabelPolicy

__all__ = [
    "LabelAction",
    "LabelPolicy",
    "LabelRunReport",
    "UpdateLabeler",
    "render_update_comment",
    "run_update_labeler",
]
