"""Identity services: exchange credentials for tokens and service endpoints."""
