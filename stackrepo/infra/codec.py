"""
YAML decoding for repository files and index documents.

Every field in these documents is a string, a timestamp, or a list or
mapping of them. Plain scalars such as `1.10`, `2.0` or `no` are kept
as the text written in the document instead of becoming numbers or
booleans.
"""

import yaml


class TextScalarLoader(yaml.SafeLoader):
    """SafeLoader that leaves int, float and bool scalars as their source text."""


for _tag in ('tag:yaml.org,2002:int', 'tag:yaml.org,2002:float', 'tag:yaml.org,2002:bool'):
    TextScalarLoader.add_constructor(_tag, TextScalarLoader.construct_scalar)


def load_document(content):
    """
    Decode a YAML document (str or bytes).

    Raises:
        yaml.YAMLError: malformed YAML, including bytes that are not valid UTF-8/16
    """
    return yaml.load(content, Loader=TextScalarLoader)
