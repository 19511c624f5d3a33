"""Record store client, repositories and notifications."""
