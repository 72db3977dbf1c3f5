"""Notifications app package.

Stores in-app notifications, renders them from a closed catalog of typed
events and sends the matching emails. Event handlers registered on the
message bus turn committed booking and review events into notifications.
"""
