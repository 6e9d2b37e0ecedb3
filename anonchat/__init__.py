"""AnonChat: a shared anonymous message board with in-memory moderation."""
