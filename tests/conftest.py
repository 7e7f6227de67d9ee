import os

# headless matplotlib for render tests
os.environ.setdefault("MPLBACKEND", "Agg")
