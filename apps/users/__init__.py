"""Users app package.

Authentication lives outside the booking core; this app only stores the
platform role of each Django user (``UserProfile``) and turns a request
user into the ``(actor_id, role)`` pair the core expects.
"""
