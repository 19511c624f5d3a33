"""Task management core: state machines and derived views."""
