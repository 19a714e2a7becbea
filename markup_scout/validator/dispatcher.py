# File: markup_scout/validator/dispatcher.py
"""markup_scout.validator.dispatcher: run the validation strategy a document's
classification calls for and flatten the outcome into a :class:`ValidationResult`.

Strategies
----------
* XHTML with ``<namespace>.xsd`` in the schema directory: XML parse with
  entity substitution and DTD loading, then XML Schema validation.
* XHTML without a schema: lenient (recovering) HTML parse; the parser's own
  diagnostics are the errors.
* HTML5 doctype: html5lib parse; each parse error becomes ``"<message> line <n>"``.
* Anything else: the single error ``"Unknown Document"``.

:meth:`Validator.validate` never raises on malformed markup.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

import html5lib
from html5lib.constants import E as HTML5_MESSAGES
from lxml import etree

from markup_scout.logger import logger
from markup_scout.validator.classifier import Classification, DocumentKind, classify

__all__ = ["ValidationResult", "Validator", "validate", "UNKNOWN_DOCUMENT"]

UNKNOWN_DOCUMENT = "Unknown Document"


@dataclass(frozen=True, slots=True)
class ValidationResult:
    errors: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0


def _encode(body: str) -> bytes:
    return body.encode("utf-8")


def _log_messages(error_log: Iterable[etree._LogEntry]) -> List[str]:
    return [f"{entry.message} line {entry.line}" for entry in error_log]


def _html5_message(code: str, datavars: object) -> str:
    template = HTML5_MESSAGES.get(code, code)
    if isinstance(datavars, dict) and datavars:
        return template % datavars
    return template


class Validator:
    """Validation dispatcher bound to a schema directory and an ignore filter.

    Parameters
    ----------
    schema_dir
        Directory holding ``<namespace>.xsd`` (and optionally
        ``<namespace>.dtd``) files. ``None`` means no schema is ever available.
    ignore
        Errors matching this pattern are dropped from every result.
    """

    def __init__(
        self,
        schema_dir: Union[str, Path, None] = None,
        ignore: Optional[re.Pattern[str]] = None,
    ) -> None:
        self.schema_dir = Path(schema_dir) if schema_dir is not None else None
        self.ignore = ignore
        self._schemas: Dict[str, etree.XMLSchema] = {}

    # public -----------------------------------------------------------------

    def validate(self, body: str, classification: Optional[Classification] = None) -> ValidationResult:
        if classification is None:
            classification = classify(body)
        try:
            errors = self._dispatch(body, classification)
        except (etree.XMLSyntaxError, etree.XMLSchemaParseError) as exc:
            errors = [str(exc)]
        if self.ignore is not None:
            errors = [e for e in errors if not self.ignore.search(e)]
        return ValidationResult(tuple(errors))

    def schema_for(self, namespace: str) -> Optional[etree.XMLSchema]:
        """Load (once) the XML Schema known for *namespace*, if any."""
        if namespace in self._schemas:
            return self._schemas[namespace]
        path = self._schema_file(namespace, ".xsd")
        if path is None:
            return None
        schema = etree.XMLSchema(etree.parse(str(path)))
        self._schemas[namespace] = schema
        return schema

    # strategies -------------------------------------------------------------

    def _dispatch(self, body: str, classification: Classification) -> List[str]:
        if classification.kind is DocumentKind.XHTML:
            document = self._localize_dtd(body, classification)
            schema = self.schema_for(classification.namespace) if classification.namespace else None
            if schema is not None:
                return self._validate_xsd(document, schema)
            return self._validate_lenient(document)
        if classification.kind is DocumentKind.HTML5:
            return self._validate_html5(body)
        return [UNKNOWN_DOCUMENT]

    def _validate_xsd(self, document: str, schema: etree.XMLSchema) -> List[str]:
        parser = etree.XMLParser(
            resolve_entities=True,
            load_dtd=True,
            no_network=True,
            recover=True,
        )
        root = etree.fromstring(_encode(document), parser, base_url=self._base_url())
        if root is None:
            return _log_messages(parser.error_log) or ["Document is empty"]
        schema.validate(root)
        return _log_messages(schema.error_log)

    def _validate_lenient(self, document: str) -> List[str]:
        parser = etree.HTMLParser(recover=True)
        root = etree.fromstring(_encode(document), parser, base_url=self._base_url())
        errors = _log_messages(parser.error_log)
        if root is None and not errors:
            errors = ["Document is empty"]
        return errors

    def _validate_html5(self, body: str) -> List[str]:
        parser = html5lib.HTMLParser(strict=False)
        parser.parse(body)
        return [f"{_html5_message(code, datavars)} line {pos[0]}" for pos, code, datavars in parser.errors]

    # helpers ----------------------------------------------------------------

    def _schema_file(self, namespace: str, suffix: str) -> Optional[Path]:
        if self.schema_dir is None:
            return None
        path = self.schema_dir / f"{namespace}{suffix}"
        return path if path.is_file() else None

    def _base_url(self) -> Optional[str]:
        return f"{self.schema_dir.as_posix()}/" if self.schema_dir is not None else None

    def _localize_dtd(self, body: str, classification: Classification) -> str:
        """Point the doctype at the local copy of its DTD, when one exists."""
        namespace, system_id = classification.namespace, classification.system_id
        if not namespace or not system_id or system_id not in body:
            return body
        if self._schema_file(namespace, ".dtd") is None:
            return body
        logger.debug("Using local DTD %s.dtd for %s", namespace, system_id)
        return body.replace(system_id, f"{namespace}.dtd", 1)


def validate(
    body: str,
    classification: Optional[Classification] = None,
    *,
    schema_dir: Union[str, Path, None] = None,
    ignore: Optional[re.Pattern[str]] = None,
) -> ValidationResult:
    """One-shot helper around :class:`Validator`."""
    return Validator(schema_dir, ignore).validate(body, classification)
