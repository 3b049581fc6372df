"""AI - hosted-model suggestions for getting unstuck

Components:
    suggestions.py: Forward a prompt to the model, pull a JSON array out of the reply
"""

# Error codes mirror callable-function conventions so clients can branch on them
ERROR_CODES = ("invalid-argument", "internal")

__all__ = ["ERROR_CODES"]
