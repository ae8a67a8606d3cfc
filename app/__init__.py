"""Einstein puzzle web service."""
