"""Identifier generation."""
import uuid


def generate_id() -> str:
    """Return a short random identifier for teams, players and goals."""
    return uuid.uuid4().hex[:12]
