"""SQLAlchemy Base class for all models."""
from app.models.base import Base


def import_models() -> None:
    """Import all models to register them with SQLAlchemy."""
    import app.models  # noqa: F401


# Import models on module load
import_models()

__all__ = ["Base", "import_models"]
