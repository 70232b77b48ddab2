from typing import Any

import yaml  # type: ignore
import yaml.constructor
import yaml.error
import yaml.scanner  # type: ignore


class UniqueKeyLoader(yaml.SafeLoader):
    """
    Custom YAML loader that forbids duplicate keys.
    """

    def construct_mapping(self, node, deep=False):
        mapping = set()
        for key_node, _ in node.value:
            key = self.construct_object(key_node, deep=deep)
            if key in mapping:
                raise yaml.constructor.ConstructorError(
                    None, None, f"found duplicate key '{key}'", key_node.start_mark
                )
            mapping.add(key)
        return super().construct_mapping(node, deep)


def load_strict_yaml(raw: str, name: str = "<deck>") -> Any:
    """
    Parse YAML text, raising detailed exceptions on tabs or duplicate keys.
    """
    # PyYAML tolerates tabs in some positions; reject them everywhere.
    if "\t" in raw:
        tab_index = raw.find("\t")
        line = raw[:tab_index].count("\n")
        column = tab_index - (raw.rfind("\n", 0, tab_index) + 1)
        raise yaml.scanner.ScannerError(
            problem="found character '\\t' that cannot start any token",
            problem_mark=yaml.error.Mark(name, tab_index, line, column, None, None),
        )

    return yaml.load(raw, Loader=UniqueKeyLoader)


def dump_yaml(data: Any) -> str:
    return yaml.safe_dump(
        data,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=10**9,
    )
