"""Activity configuration model."""

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from time_tracker.config.paths import DEFAULT_ACTIVITIES
from time_tracker.exceptions import InvalidConfig


class _ConfigLoader(yaml.SafeLoader):
    """SafeLoader where only ``true``/``false`` are booleans.

    YAML 1.1 also resolves ``yes``, ``no``, ``on`` and ``off``, which would
    turn activity labels such as ``Off`` into booleans.
    """


def _construct_bool(loader: yaml.SafeLoader, node: yaml.ScalarNode) -> bool | str:
    value = loader.construct_scalar(node)
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    return value


_ConfigLoader.add_constructor("tag:yaml.org,2002:bool", _construct_bool)


class ActivityConfig(BaseModel):
    """The set of activity labels offered for logging.

    Order is display order and duplicates are kept as written.
    """

    activities: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ACTIVITIES),
        min_length=1,
        description="Activity labels in display order",
    )

    @field_validator("activities")
    @classmethod
    def _labels_not_blank(cls, value: list[str]) -> list[str]:
        for label in value:
            if not label.strip():
                raise ValueError("activity labels cannot be blank")
        return value

    @classmethod
    def default(cls) -> "ActivityConfig":
        """Built-in configuration used when nothing has been saved."""
        return cls(activities=list(DEFAULT_ACTIVITIES))

    @classmethod
    def from_yaml(cls, text: str | None) -> "ActivityConfig":
        """Parse the editable YAML document.

        Absent text gives the built-in default. Keys other than
        ``activities`` are ignored.

        Raises:
            InvalidConfig: If the YAML is malformed or has no usable
                ``activities`` list.
        """
        if text is None:
            return cls.default()

        try:
            data = yaml.load(text, Loader=_ConfigLoader)
        except yaml.YAMLError as e:
            raise InvalidConfig(f"YAML syntax error: {e}") from e

        if not isinstance(data, dict):
            raise InvalidConfig("Expected a mapping with an 'activities' list")
        activities = data.get("activities")
        if not isinstance(activities, list):
            raise InvalidConfig("'activities' must be a list of activity names")

        try:
            return cls(activities=activities)
        except ValidationError as e:
            messages = "; ".join(err["msg"] for err in e.errors())
            raise InvalidConfig(f"Invalid activities: {messages}") from e

    def to_yaml(self) -> str:
        """Render the editable YAML document, one activity per line."""
        return yaml.dump(
            self.model_dump(mode="json"),
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
