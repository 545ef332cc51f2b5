"""Forum Stage: site administration, search and moderation log service."""
