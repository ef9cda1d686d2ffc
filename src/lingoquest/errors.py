"""Exception and warning types raised by the question engine."""


class LingoQuestError(Exception):
    """Base class for engine errors."""


class LoadError(LingoQuestError):
    """Vocabulary could not be retrieved or was unusable."""


class EngineNotReadyError(LingoQuestError, RuntimeError):
    """An operation needs vocabulary that has not been loaded yet."""


class InvalidLanguage(UserWarning):
    """The requested answer language is unsupported; English is used instead."""


class MissingTranslation(UserWarning):
    """A pool entry has no translation in the requested language and was skipped."""
