"""Modals package - modal screen definitions.

Modals:
- LeaderboardModal: Sortable leaderboard table loaded from a JSONL source
"""

from ranktable.modals.leaderboard_modal import LeaderboardModal

__all__ = ["LeaderboardModal"]
