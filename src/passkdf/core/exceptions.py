"""
Централизованные исключения passkdf.

Typed exception hierarchy for key derivation and for the encoded
``$argon2id$...`` / ``$pbkdf2$...`` string format.

Иерархия:
    CryptoError (базовое)
    ├── AlgorithmError
    │   └── UnsupportedAlgorithmError
    ├── KeyDerivationError
    ├── EncodingError
    │   ├── UnrecognizedEncodingError
    │   ├── MalformedEncodingError
    │   ├── IncompatibleVersionError
    │   └── InvalidBase64Error
    └── ValidationError
        └── InvalidParameterError

Security Note:
    Сообщения НЕ содержат паролей, солей или производных ключей.
    Only operational data (field names, parameter names, versions) is reported.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

__all__: list[str] = [
    "CryptoError",
    "AlgorithmError",
    "UnsupportedAlgorithmError",
    "KeyDerivationError",
    "EncodingError",
    "UnrecognizedEncodingError",
    "MalformedEncodingError",
    "IncompatibleVersionError",
    "InvalidBase64Error",
    "ValidationError",
    "InvalidParameterError",
]


# ==============================================================================
# BASE EXCEPTION
# ==============================================================================


class CryptoError(Exception):
    """
    Базовое исключение для всех ошибок passkdf.

    Attributes:
        message: Человекочитаемое сообщение об ошибке
        algorithm: Имя алгоритма, вызвавшего ошибку (опционально)
        context: Дополнительный контекст без секретов (опционально)

    Example:
        >>> try:
        ...     kdf = parse(stored)
        ... except CryptoError as e:
        ...     logger.error("Cannot load stored secret: %s", e)
    """

    def __init__(
        self,
        message: str,
        *,
        algorithm: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.algorithm = algorithm
        self.context = context or {}

    def __str__(self) -> str:
        """
        Строковое представление исключения.

        Example:
            >>> str(MalformedEncodingError("bad field count", algorithm="pbkdf2"))
            'MalformedEncodingError: bad field count [algorithm=pbkdf2]'
        """
        parts = [self.__class__.__name__, ": ", self.message]

        if self.algorithm:
            parts.append(f" [algorithm={self.algorithm}]")

        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            parts.append(f" ({ctx_str})")

        return "".join(parts)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"algorithm={self.algorithm!r}, "
            f"context={self.context!r})"
        )


# ==============================================================================
# ALGORITHM ERRORS
# ==============================================================================


class AlgorithmError(CryptoError):
    """Ошибки выбора или работы алгоритма."""

    pass


class UnsupportedAlgorithmError(AlgorithmError):
    """
    Алгоритм (или дайджест) не поддерживается.

    Raises когда:
    - В фабрику передан неизвестный AlgorithmType
    - PBKDF2 экземпляр с неизвестным дайджестом просят сгенерировать ключ

    Attributes:
        reason: Причина отсутствия поддержки
    """

    def __init__(self, algorithm: str, reason: str) -> None:
        super().__init__(
            f"Algorithm '{algorithm}' not supported: {reason}",
            algorithm=algorithm,
            context={"reason": reason},
        )
        self.reason = reason


class KeyDerivationError(CryptoError):
    """
    Ошибка при выводе ключа.

    Wraps failures of the underlying primitive (argon2-cffi, cryptography),
    e.g. a salt shorter than the primitive accepts or a memory cost below
    ``8 * parallelism``.
    """

    pass


# ==============================================================================
# ENCODING ERRORS
# ==============================================================================


class EncodingError(CryptoError):
    """Базовая ошибка разбора закодированной строки."""

    pass


class UnrecognizedEncodingError(EncodingError):
    """Строка не начинается ни с одного известного префикса."""

    def __init__(self, message: str = "unknown encoded format") -> None:
        super().__init__(message)


class MalformedEncodingError(EncodingError):
    """
    Структурно некорректная строка.

    Raises когда:
    - Неверное число полей после разбиения по ``$``
    - Поле параметров не соответствует ожидаемому шаблону
    - Числовое значение выходит за допустимый диапазон
    """

    pass


class IncompatibleVersionError(EncodingError):
    """
    Версия примитива в строке отличается от версии в процессе.

    Attributes:
        expected: Версия, поддерживаемая установленной библиотекой
        actual: Версия из закодированной строки
    """

    def __init__(self, algorithm: str, expected: int, actual: int) -> None:
        super().__init__(
            f"incompatible version {actual}",
            algorithm=algorithm,
            context={"expected": expected, "actual": actual},
        )
        self.expected = expected
        self.actual = actual


class InvalidBase64Error(EncodingError):
    """
    Сегмент соли или хэша не является корректным base64 без padding.

    Attributes:
        segment: Имя сегмента ("salt" или "hash")
    """

    def __init__(self, algorithm: str, segment: str) -> None:
        super().__init__(
            f"invalid base64 in {segment} segment",
            algorithm=algorithm,
            context={"segment": segment},
        )
        self.segment = segment


# ==============================================================================
# VALIDATION ERRORS
# ==============================================================================


class ValidationError(CryptoError):
    """Базовая ошибка валидации входных данных."""

    pass


class InvalidParameterError(ValidationError):
    """
    Некорректный параметр конфигурации или входа.

    Attributes:
        parameter: Имя параметра
        reason: Причина ошибки
    """

    def __init__(
        self,
        parameter: str,
        reason: str,
        *,
        algorithm: Optional[str] = None,
    ) -> None:
        super().__init__(
            f"Invalid parameter '{parameter}': {reason}",
            algorithm=algorithm,
            context={"parameter": parameter},
        )
        self.parameter = parameter
        self.reason = reason
