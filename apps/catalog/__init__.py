"""Catalog app package.

Holds the bookable services run by local business owners and the
attractions tourists can review. Search, pagination and media for these
entities are handled elsewhere; the booking core only needs their price,
owner and the derived rating fields.
"""
