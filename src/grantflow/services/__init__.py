"""
Services for the permission flow and the dependent server notification.
"""
