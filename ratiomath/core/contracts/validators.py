"""
JSON Schema Contract Validators

Валидация сериализованных значений ratiomath по JSON Schema контрактам.
Использует библиотеку jsonschema (Draft 2020-12).

Схемы (ratiomath/core/contracts/schema/):
- decimal_value.json: JSON-строка DecimalValue ("-12.5", "1e-3")
- fraction_literal.json: литерал Fraction ("2 3/4", "NaN", "-Infinity")
- precision_context.json: payload PrecisionContext ({"digits": 50})
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы поставляются как package data в каталоге schema/ рядом с модулем.
    """

    def __init__(self, schema_dir: Path = Path(__file__).parent / "schema"):
        self._schema_dir = schema_dir
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'decimal_value')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является корректной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # meta-validation
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Any) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Any) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Any) -> Iterator[ValidationError]:
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


class DecimalValueValidator(ContractValidator):
    """Валидатор JSON-строки DecimalValue."""

    def __init__(self):
        super().__init__("decimal_value")


class FractionLiteralValidator(ContractValidator):
    """Валидатор литерала Fraction."""

    def __init__(self):
        super().__init__("fraction_literal")


class PrecisionContextValidator(ContractValidator):
    """Валидатор payload PrecisionContext."""

    def __init__(self):
        super().__init__("precision_context")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_decimal_value(data: Any) -> None:
    """
    Валидация JSON-строки DecimalValue.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    DecimalValueValidator().validate(data)


def validate_fraction_literal(data: Any) -> None:
    """
    Валидация литерала Fraction.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    FractionLiteralValidator().validate(data)


def validate_precision_context(data: Dict[str, Any]) -> None:
    """
    Валидация payload PrecisionContext.

    Args:
        data: Данные для валидации

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    PrecisionContextValidator().validate(data)
