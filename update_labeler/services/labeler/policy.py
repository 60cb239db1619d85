"""Mapping from classification results to label mutations."""

from dataclasses import dataclass

from update_labeler.config import settings
from update_labeler.services.classifier import ClassificationResult


@dataclass(frozen=True)
class LabelAction:
    """Label changes (and whether to ask for an update) for one result."""

    add: tuple[str, ...] = ()
    remove: tuple[str, ...] = ()
    request_update: bool = False


@dataclass(frozen=True)
class LabelPolicy:
    """Label names used for each classification result."""

    updated: str = "Status: Updated"
    to_update: str = "To Update !"
    inactive: str = "2 weeks inactive"

    @classmethod
    def from_settings(cls) -> "LabelPolicy":
        return cls(
            updated=settings.label_updated,
            to_update=settings.label_to_update,
            inactive=settings.label_inactive,
        )

    @property
    def all_labels(self) -> tuple[str, ...]:
        return (self.updated, self.to_update, self.inactive)

    def action_for(self, result: ClassificationResult) -> LabelAction:
        """Get the label changes for a classification result."""
        if result == ClassificationResult.UPDATED:
            return LabelAction(add=(self.updated,), remove=(self.to_update, self.inactive))
        if result == ClassificationResult.NEEDS_UPDATE:
            return LabelAction(
                add=(self.to_update,),
                remove=(self.updated, self.inactive),
                request_update=True,
            )
        if result == ClassificationResult.INACTIVE:
            return LabelAction(
                add=(self.inactive,),
                remove=(self.to_update, self.updated),
                request_update=True,
            )
        # Recently assigned: clear every status label, add nothing
        return LabelAction(remove=self.all_labels)
