"""Users feature: sign-up and profile lookup."""
