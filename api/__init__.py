"""
api — HTTP routes for profiles, goals and problems, plus app-wide middleware.
"""
