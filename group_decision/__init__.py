"""Group restaurant decision service: tiered voting and history-weighted random selection."""
