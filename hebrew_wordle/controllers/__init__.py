"""
Controllers Package

Flask blueprints exposing the game and progress endpoints.
"""
