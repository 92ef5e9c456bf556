# exceptions.py

class AuthenticationError(Exception):
    """Google Drive credentials could not be obtained or are unusable."""
    pass
