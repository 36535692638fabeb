from utils.environment import EnvironmentConfig


class Config:
    """Base configuration, populated from the environment"""

    def __init__(self, env=None):
        env = env or EnvironmentConfig()
        self.DEBUG = env.is_debug_mode()
        self.TESTING = False
        self.MAX_CONTENT_LENGTH = 25 * 1024 * 1024  # Groq rejects larger audio uploads
        self.GROQ_API_KEY = env.groq_api_key
        self.GROQ_CHAT_MODEL = env.chat_model
        self.GROQ_TRANSCRIPTION_MODEL = env.transcription_model
        self.LANGUAGE_SERVICE_TIMEOUT = env.language_service_timeout
        self.DATABASE_PATH = env.database_path
        self.LOG_LEVEL = env.log_level
        self.LOG_FILE = env.log_file


class DevelopmentConfig(Config):
    def __init__(self, env=None):
        super().__init__(env)
        self.DEBUG = True
        self.LOG_LEVEL = 'DEBUG'


class ProductionConfig(Config):
    def __init__(self, env=None):
        super().__init__(env)
        self.DEBUG = False


class TestingConfig(Config):
    def __init__(self, env=None):
        super().__init__(env)
        self.TESTING = True
        self.LOG_FILE = None


config = {
    'default': Config,
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
}
