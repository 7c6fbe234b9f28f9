# Supabase Auth
# Credentials, sessions and JWTs live in Supabase Auth (auth.users).
# The public profile row created at registration lives in the users table,
# documented in app/modules/users/models.py.

"""
Supabase Auth provides:
- auth.sign_up() - Register new users (metadata: {"name": ...})
- auth.sign_in_with_password() - Authenticate users
- auth.get_user() - Resolve the user behind a JWT (the session check)
- auth.admin.sign_out(jwt, scope) - Revoke the session behind a token (service-role client)
"""
