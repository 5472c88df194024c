"""
auth — User authentication module.

Provides:
  • Signed token creation & verification
  • Password hashing (bcrypt, 10 rounds)
  • Register / Login API routes
  • ``require_token`` bearer-token dependency
"""
