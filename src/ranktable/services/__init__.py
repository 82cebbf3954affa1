"""Services package - import from subdirectories directly.

Subpackages:
- config: View settings persistence
- leaderboard: Record loading, field resolution, scoring, and columns
"""
