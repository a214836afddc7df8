"""Specialised route resolvers."""

from perch.resolvers.discussion import DiscussionPageResolver, leading_id, parse_near

__all__ = ["DiscussionPageResolver", "leading_id", "parse_near"]
