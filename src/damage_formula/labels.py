"""
Damage type display labels for breakdown lines.
"""

from pathlib import Path

import yaml

DEFAULT_LABELS_PATH = Path(__file__).parent / "data" / "damage_types.yaml"


class DamageTypeLabels:
    """Maps damage types to their display labels.

    Unknown damage types fall back to the raw type string, so a missing
    catalogue entry never blocks a breakdown.

    Example:
        >>> labels = DamageTypeLabels.load()
        >>> labels.label("fire")
        'Fire'
        >>> labels.persistent_label("bleed")
        'Bleed Persistent Damage'
    """

    def __init__(
        self,
        damage_types: dict[str, str] | None = None,
        persistent_format: str = "{damage_type} Persistent Damage",
    ) -> None:
        self._labels: dict[str, str] = dict(damage_types or {})
        self.persistent_format = persistent_format

    @classmethod
    def load(cls, path: Path | None = None) -> "DamageTypeLabels":
        """Load a catalogue, defaulting to the bundled one."""
        labels = cls()
        labels.load_yaml(path or DEFAULT_LABELS_PATH)
        return labels

    def load_yaml(self, path: Path) -> None:
        """Load labels from a YAML file.

        Expected YAML format:
            persistent_format: "{damage_type} Persistent Damage"
            damage_types:
              fire: Fire
              cold: Cold

        Args:
            path: Path to YAML file

        Raises:
            FileNotFoundError: If the YAML file doesn't exist
            yaml.YAMLError: If the YAML is malformed
            ValueError: If the 'damage_types' key is missing
        """
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if not data or "damage_types" not in data:
            raise ValueError("YAML file must contain a 'damage_types' key")

        self._labels = {str(key): str(value) for key, value in (data["damage_types"] or {}).items()}
        if "persistent_format" in data:
            self.persistent_format = str(data["persistent_format"])

    def label(self, damage_type: str) -> str:
        return self._labels.get(damage_type, damage_type)

    def persistent_label(self, damage_type: str) -> str:
        return self.persistent_format.format(damage_type=self.label(damage_type))

    def __contains__(self, damage_type: str) -> bool:
        return damage_type in self._labels

    def __len__(self) -> int:
        return len(self._labels)
