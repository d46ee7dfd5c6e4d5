"""Wire and log encoders."""
