"""Cross‑cutting infrastructure: settings, logging, errors and middleware."""
