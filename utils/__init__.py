"""
utils — errors, request validators and API schemas.
"""
