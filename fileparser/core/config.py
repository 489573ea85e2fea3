import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


class Settings:
    """Application settings loaded from environment variables."""
    
    def __init__(self):
        self.APP_NAME = os.environ.get("APP_NAME", "fileparser")
        self.ENV = os.environ.get("ENV", "development")
        self.LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
        
        # Default root for relative document paths (read once per process)
        workspace_path = os.environ.get("WORKSPACE_PATH", "").strip()
        self.WORKSPACE_PATH = workspace_path or None
        
        # Summary Configuration
        self.PREVIEW_LIMIT = int(os.environ.get("PREVIEW_LIMIT", "6000"))
        self.TABLE_SAMPLE_ROWS = int(os.environ.get("TABLE_SAMPLE_ROWS", "15"))
    
    def __repr__(self):
        return (
            f"Settings(APP_NAME={self.APP_NAME}, ENV={self.ENV}, "
            f"LOG_LEVEL={self.LOG_LEVEL}, WORKSPACE_PATH={self.WORKSPACE_PATH}, "
            f"PREVIEW_LIMIT={self.PREVIEW_LIMIT}, TABLE_SAMPLE_ROWS={self.TABLE_SAMPLE_ROWS})"
        )


settings = Settings()
