from .base_model_mixin import BaseModel, VersionedConfigModel

__all__ = ["BaseModel", "VersionedConfigModel"]
