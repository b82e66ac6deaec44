import os

# GitPython refuses to import without a git executable unless told otherwise.
os.environ.setdefault("GIT_PYTHON_REFRESH", "quiet")
