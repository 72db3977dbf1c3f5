"""HTTP adapter helpers shared by the DRF views."""
