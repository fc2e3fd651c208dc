"""Global pytest configuration."""

import os

# No real completion backend in tests; set before any settings are loaded
os.environ["OPENAI_API_KEY"] = ""
