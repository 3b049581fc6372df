"""Dashboard - the HTTP face of Momentum"""
