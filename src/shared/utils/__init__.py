from src.shared.utils.datetime import ensure_utc, from_iso, to_iso

__all__ = ["ensure_utc", "from_iso", "to_iso"]
