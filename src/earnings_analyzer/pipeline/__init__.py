"""Pipeline stages for transcript analysis."""
