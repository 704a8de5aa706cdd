import os

# Keep test runs from writing backend.log into the repo
os.environ.setdefault("LOG_TO_FILE", "false")
