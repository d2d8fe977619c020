"""
auth — User authentication module.

Provides:
  • JWT token creation & verification
  • Password hashing (bcrypt, off the event loop)
  • Signup / Login / Logout API routes
  • ``AuthService`` for registration, login and profile updates
  • ``get_current_identity`` / ``get_current_user_id`` FastAPI dependencies
"""
