"""Dashboard Backend Package

FastAPI-based REST API for the Momentum app: sign-in, voids,
today's next actions, and AI suggestions.
"""
