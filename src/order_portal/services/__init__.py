"""Business logic services for the customer portal.

Identity and order services take an injected transport; schedule_service
holds pure derivation functions.
"""
