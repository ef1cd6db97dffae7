"""
Card Parser
===========

Load card documents written as JSON or YAML into document models.
Syntax and model errors are reported in the parse result, never raised.
"""

from typing import Dict, List, Any, Optional
import json
import yaml  # type: ignore[import-untyped]
import time
from abc import ABC, abstractmethod

from pydantic import ValidationError

from card_render.config.logging import get_logger
from card_render.models.schemas import AdaptiveCard, ParseResult, ELEMENT_TYPES, ACTION_TYPES

logger = get_logger(__name__)


class CardParseError(Exception):
    """Exception raised when a card cannot be parsed."""

    pass


def format_validation_errors(error: ValidationError) -> List[str]:
    """Format pydantic validation errors as ``path: message`` strings."""
    formatted_errors: List[str] = []
    for item in error.errors():
        path = ".".join(str(part) for part in item["loc"])
        formatted_errors.append(f"{path}: {item['msg']}" if path else item["msg"])
    return formatted_errors


NODE_KEYS = ("body", "items", "columns", "images", "actions", "card", "selectAction")


def collect_unknown_types(data: Any, path: str = "card") -> List[str]:
    """Warn about node types the renderer does not know."""
    warnings: List[str] = []

    if isinstance(data, dict):
        kind = data.get("type")
        if isinstance(kind, str) and kind not in ELEMENT_TYPES and kind not in ACTION_TYPES:
            warnings.append(f"{path}: Unknown element type '{kind}' will be omitted")
        for key in NODE_KEYS:
            if key in data:
                warnings.extend(collect_unknown_types(data[key], f"{path}.{key}"))
    elif isinstance(data, list):
        for i, item in enumerate(data):
            warnings.extend(collect_unknown_types(item, f"{path}[{i}]"))

    return warnings


class BaseCardParser(ABC):
    """Abstract base class for card parsers."""

    format_name = "base"

    def __init__(self) -> None:
        self.logger: Any = logger.bind(parser=self.format_name)  # structlog.BoundLoggerBase

    @abstractmethod
    def load(self, content: str) -> Any:
        """Load raw content into plain data."""
        pass

    @abstractmethod
    def validate_syntax(self, content: str) -> bool:
        """Validate syntax without building a card."""
        pass

    def parse(self, content: str) -> ParseResult:
        """
        Parse card content into an AdaptiveCard.

        Args:
            content: Raw card content as string

        Returns:
            ParseResult containing the parsed card or errors
        """
        start_time = time.time()

        try:
            self.logger.info(f"Parsing {self.format_name.upper()} card content")
            raw_data = self.load(content)

            if not isinstance(raw_data, dict):
                return ParseResult(
                    success=False,
                    card=None,
                    errors=[f"Card content must be an object, got {type(raw_data).__name__}"],
                    processing_time=time.time() - start_time,
                )

            card = self.convert_to_card(raw_data)

            return ParseResult(
                success=True,
                card=card,
                errors=[],
                warnings=collect_unknown_types(raw_data),
                processing_time=time.time() - start_time,
            )

        except CardParseError as e:
            self.logger.error("Card parsing failed", error=str(e))
            return ParseResult(
                success=False,
                card=None,
                errors=[str(e)],
                processing_time=time.time() - start_time,
            )
        except ValidationError as e:
            errors = format_validation_errors(e)
            self.logger.error("Card validation failed", error_count=len(errors))
            return ParseResult(
                success=False,
                card=None,
                errors=errors,
                processing_time=time.time() - start_time,
            )

    def convert_to_card(self, raw_data: Dict[str, Any]) -> AdaptiveCard:
        """
        Convert plain data to an AdaptiveCard.

        Args:
            raw_data: Parsed card data

        Returns:
            AdaptiveCard instance
        """
        if raw_data.get("type", "AdaptiveCard") != "AdaptiveCard":
            raise CardParseError(f"Root type must be 'AdaptiveCard', got '{raw_data.get('type')}'")
        return AdaptiveCard.model_validate(raw_data)


class JSONCardParser(BaseCardParser):
    """JSON card parser implementation."""

    format_name = "json"

    def load(self, content: str) -> Any:
        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise CardParseError(
                f"Invalid JSON syntax at line {e.lineno}, column {e.colno}: {e.msg}"
            ) from e

    def validate_syntax(self, content: str) -> bool:
        """
        Validate JSON card syntax.

        Args:
            content: Raw card content as string

        Returns:
            True if syntax is valid, False otherwise
        """
        try:
            json.loads(content)
            return True
        except json.JSONDecodeError:
            return False


class YAMLCardParser(BaseCardParser):
    """YAML card parser implementation."""

    format_name = "yaml"

    def load(self, content: str) -> Any:
        try:
            raw_data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise CardParseError(f"Invalid YAML syntax: {e}") from e

        if raw_data is None:
            raise CardParseError("Empty YAML document")
        return raw_data

    def validate_syntax(self, content: str) -> bool:
        """
        Validate YAML card syntax.

        Args:
            content: Raw card content as string

        Returns:
            True if syntax is valid, False otherwise
        """
        try:
            yaml.safe_load(content)
            return True
        except yaml.YAMLError:
            return False


class CardParserFactory:
    """Factory for creating card parsers based on content type."""

    _parsers = {
        "json": JSONCardParser,
        "yaml": YAMLCardParser,
    }

    @classmethod
    def create_parser(cls, parser_type: str) -> BaseCardParser:
        """
        Create a card parser instance.

        Args:
            parser_type: Type of parser ("json", "yaml")

        Returns:
            Card parser instance

        Raises:
            ValueError: If parser type is not supported
        """
        if parser_type not in cls._parsers:
            raise ValueError(f"Unsupported parser type: {parser_type}")

        return cls._parsers[parser_type]()

    @classmethod
    def detect_parser_type(cls, content: str) -> str:
        """
        Detect card format from content.

        Args:
            content: Raw card content

        Returns:
            Detected parser type
        """
        content = content.strip()
        if content.startswith("{"):
            return "json"
        # Try to parse as JSON first, fallback to YAML
        try:
            json.loads(content)
            return "json"
        except json.JSONDecodeError:
            return "yaml"


def parse_card(content: str, parser_type: Optional[str] = None) -> ParseResult:
    """
    Parse card content using the appropriate parser.

    Args:
        content: Raw card content
        parser_type: Optional parser type override

    Returns:
        ParseResult containing the parsed card or errors
    """
    if not content or not content.strip():
        return ParseResult(
            success=False, card=None, errors=["Empty card content provided"], processing_time=0.0
        )

    if not parser_type:
        parser_type = CardParserFactory.detect_parser_type(content)

    try:
        parser = CardParserFactory.create_parser(parser_type)
        return parser.parse(content)
    except ValueError as e:
        return ParseResult(success=False, card=None, errors=[str(e)], processing_time=0.0)


def load_card(content: str, parser_type: Optional[str] = None) -> AdaptiveCard:
    """
    Parse card content, raising on failure.

    Args:
        content: Raw card content
        parser_type: Optional parser type override

    Returns:
        Parsed card

    Raises:
        CardParseError: If the content cannot be parsed
    """
    result = parse_card(content, parser_type)
    if not result.success or result.card is None:
        raise CardParseError("; ".join(result.errors) or "Card could not be parsed")
    return result.card
