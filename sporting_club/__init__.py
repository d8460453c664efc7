"""
Sporting club record store: sports, members and their subscriptions.
"""
from sporting_club.services.club_store import ClubStore

__all__ = ["ClubStore"]
