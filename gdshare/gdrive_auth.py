import os
import json
import logging
from google_auth_oauthlib.flow import InstalledAppFlow
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials

from .exceptions import AuthenticationError

# The scope for Google Drive API
SCOPES = ["https://www.googleapis.com/auth/drive"]


def gdrive_authenticate(
    credentials_path="credentials.json", token_path="token.json", scopes=None
) -> Credentials:
    """
    Handles the OAuth 2.0 flow for Google Drive API.
    Reuses the token stored in token_path, refreshing it when it has expired.
    Otherwise runs the local-server flow with the client secrets in
    credentials_path and saves the new token for the next run.

    Raises:
        AuthenticationError: If no usable credentials could be obtained.
    """
    scopes = scopes or SCOPES
    creds = None
    token_path = str(token_path)
    credentials_path = str(credentials_path)

    # Check if a token file already exists
    if os.path.exists(token_path):
        try:
            with open(token_path, "r") as token_file:
                creds_data = json.load(token_file)
            creds = Credentials.from_authorized_user_info(creds_data, scopes)
        except (ValueError, KeyError) as e:
            logging.warning(f"Ignoring unreadable token file {token_path}: {e}")
            creds = None

    if creds and creds.valid:
        return creds

    try:
        if creds and creds.expired and creds.refresh_token:
            logging.info("Refreshing expired Google Drive token...")
            creds.refresh(Request())
        else:
            if not os.path.exists(credentials_path):
                raise AuthenticationError(
                    f"Client secret file '{credentials_path}' does not exist."
                )
            with open(credentials_path, "r") as secrets_file:
                client_config = json.load(secrets_file)

            flow = InstalledAppFlow.from_client_config(client_config, scopes)
            creds = flow.run_local_server(port=0)
    except AuthenticationError:
        raise
    except Exception as e:
        # Covers oauthlib errors (e.g. access_denied) and the scope-change Warning
        raise AuthenticationError(f"Unable to authorise connection: {e}") from e

    # Save the credentials for the next run
    try:
        with open(token_path, "w") as token_file:
            token_file.write(creds.to_json())
        logging.info(f"Token saved to {token_path}")
    except OSError as e:
        logging.warning(f"Could not save token to {token_path}: {e}")

    return creds
