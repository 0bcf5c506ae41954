"""Sleep fetching and orchestration."""
