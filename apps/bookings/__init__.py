"""Bookings app package.

This app encapsulates the booking lifecycle: the Booking aggregate and
its role-scoped transition table, the command handlers that create, edit,
transition and delete bookings inside a unit of work, and the domain
events the notifications app turns into in-app and email notices.
"""
