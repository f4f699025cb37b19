"""Shared machinery for the AI flows.

A flow is a named request/response wrapper around one call to the hosted
model: the input is validated against ``input_schema``, rendered into a
prompt, and the model's JSON answer is validated against ``output_schema``.
"""
import logging
import typing
from typing import Any, Dict, Type, Union

from pydantic import BaseModel, ValidationError

from genai_client import DEFAULT_SAFETY_SETTINGS

logger = logging.getLogger('nephra.flows')

_SCHEMA_TYPES = {
    str: 'STRING',
    int: 'INTEGER',
    float: 'NUMBER',
    bool: 'BOOLEAN',
}


class FlowError(Exception):
    """Base class for flow failures."""


class FlowOutputError(FlowError):
    """Raised when the model's answer does not match the output schema."""


def response_schema_for(model: Type[BaseModel]) -> Dict[str, Any]:
    """Build the generateContent ``responseSchema`` for a flat pydantic model."""
    properties: Dict[str, Any] = {}
    required = []
    for name, field in model.model_fields.items():
        annotation = field.annotation
        nullable = False
        if typing.get_origin(annotation) is Union:
            args = [a for a in typing.get_args(annotation) if a is not type(None)]
            nullable = len(args) < len(typing.get_args(annotation))
            annotation = args[0] if args else str
        prop: Dict[str, Any] = {'type': _SCHEMA_TYPES.get(annotation, 'STRING')}
        if field.description:
            prop['description'] = field.description
        if nullable:
            prop['nullable'] = True
        properties[name] = prop
        if field.is_required():
            required.append(name)
    return {'type': 'OBJECT', 'properties': properties, 'required': required}


class Flow:
    """Base class for a prompt-backed flow.

    Sub-classes set ``name``, ``input_schema`` and ``output_schema`` and
    implement :meth:`render_prompt`.
    """

    name: str = ''
    input_schema: Type[BaseModel] = BaseModel
    output_schema: Type[BaseModel] = BaseModel
    safety_settings = DEFAULT_SAFETY_SETTINGS

    def __init__(self, client) -> None:
        """
        Args:
            client: Object exposing ``generate_json(prompt, response_schema=,
                safety_settings=)``, normally a ``GeminiClient``.
        """
        if client is None:
            raise ValueError(f"{type(self).__name__} needs a generative-AI client")
        self._client = client

    def render_prompt(self, data: BaseModel) -> str:
        raise NotImplementedError

    def run(self, payload: Union[BaseModel, Dict[str, Any]]) -> BaseModel:
        """Validate *payload*, call the model and return the validated output.

        Raises:
            pydantic.ValidationError: *payload* does not match the input schema.
            genai_client.GenAIError:   The model call failed.
            FlowOutputError:           The answer does not match the output schema.
        """
        if isinstance(payload, self.input_schema):
            data = payload
        else:
            data = self.input_schema.model_validate(payload)

        logger.debug("Running flow %s", self.name)
        raw = self._client.generate_json(
            self.render_prompt(data),
            response_schema=response_schema_for(self.output_schema),
            safety_settings=self.safety_settings,
        )
        try:
            return self.output_schema.model_validate(raw)
        except ValidationError as exc:
            raise FlowOutputError(f"{self.name} returned invalid output: {exc}") from exc

    __call__ = run


def format_number(value: float) -> str:
    """Render 55.0 as ``55`` and 55.5 as ``55.5`` inside prompts."""
    return f"{value:g}"
