from .lineup_session import LineupSession

__all__ = ["LineupSession"]
