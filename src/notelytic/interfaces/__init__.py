"""User-facing interfaces built on the Notelytic core."""
