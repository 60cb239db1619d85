from update_labeler.api.v1 import internal

__all__ = ["internal"]
