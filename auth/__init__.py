"""
auth — User authentication module.

Provides:
  • Signed bearer token creation & verification
  • Password hashing (bcrypt)
  • Register / Login service and API routes
  • ``get_current_user`` FastAPI dependency
"""
