import os
from google.cloud import secretmanager
from google.oauth2 import service_account
from google.api_core.exceptions import NotFound

from config.config import settings
from logger import logger

SECRETS_SERVICE_ACCOUNT_KEY_FILE_PATH = os.getenv('SECRETS_SERVICE_ACCOUNT_KEY_FILE_PATH', 'secrets/service-account.json')

class SecretManager():

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.init()
        return cls._instance

    def init(self):
        logger.info("[SECRET_MANAGER] Initializing Google Cloud Secret Manager...")
        cred = service_account.Credentials.from_service_account_file(SECRETS_SERVICE_ACCOUNT_KEY_FILE_PATH) \
            if os.path.exists(SECRETS_SERVICE_ACCOUNT_KEY_FILE_PATH) \
            else None

        self.client = secretmanager.SecretManagerServiceClient(credentials=cred)
        logger.info("[SECRET_MANAGER] Google Cloud Secret Manager initialized successfully")

    def secret(self, secret_id, version_id="latest"):
        """
        Accesses the payload of the specified secret version.

        Args:
            secret_id (str): The ID of the secret.
            version_id (str): The version of the secret (default: "latest").

        Returns:
            str: The secret payload as a string, or None when it doesn't exist.
        """
        name = f"projects/{settings.GCP.PROJECT_ID}/secrets/{secret_id}/versions/{version_id}"

        try:
            response = self.client.access_secret_version(request={"name": name})
            return response.payload.data.decode("UTF-8")
        except NotFound:
            logger.error(f"[SECRET_MANAGER] Secret {secret_id} with version {version_id} not found.")
            return None


class LazySecretManager:
    """Secret lookup that only reaches Secret Manager when the feature flag is on"""

    def secret(self, secret_id, version_id="latest"):
        if not settings.FeatureFlags.ENABLE_SECRET_MANAGER:
            env_value = os.getenv(secret_id)
            if not env_value:
                logger.warning(f"[SECRET_MANAGER] No environment variable found for: {secret_id}")
            return env_value

        return SecretManager().secret(secret_id, version_id)

secret_mgr = LazySecretManager()
