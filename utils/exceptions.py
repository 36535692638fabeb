class AppError(Exception):
    """Base exception for the consultation service"""
    status_code = 500
    error_code = 'internal_error'

    def __init__(self, message, error_code=None, details=None):
        self.message = message
        if error_code:
            self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self):
        return {
            'status': 'error',
            'error': self.error_code,
            'message': self.message
        }


class ValidationError(AppError):
    """A required identifier or field is missing or invalid"""
    status_code = 400
    error_code = 'validation_error'


class NotFoundError(AppError):
    """Referenced conversation does not exist, or has nothing to summarize"""
    status_code = 404
    error_code = 'not_found'


class ConfigurationError(AppError):
    """Required configuration (API credential) is missing"""
    error_code = 'configuration_error'


class PersistenceError(AppError):
    """The SQLite store could not be read or written"""
    error_code = 'persistence_error'


class LanguageServiceError(AppError):
    """A call to the language service failed"""
    error_code = 'language_service_error'


class TranslationError(LanguageServiceError):
    error_code = 'translation_error'


class TranscriptionError(LanguageServiceError):
    error_code = 'transcription_error'


class SummaryError(LanguageServiceError):
    error_code = 'summary_error'


class SummaryFormatError(SummaryError):
    """The summary response could not be parsed into the expected shape"""
    error_code = 'summary_format_error'
