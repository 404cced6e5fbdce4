"""Building blocks shared by every service: auth, transport, API definitions."""
