"""check_file_extension.py
Checks a file's extension against the extensions a parser accepts.
"""

import os

from resume_rag.exceptions import FileNotSupportedError

def check_file_extension(file_path: str, supported_extensions: list[str]) -> str:
    """
    Validate and return the lowercase extension of `file_path`.

    Matching is case-insensitive and prefers the longest supported extension,
    so multi-dot extensions such as '.tar.gz' work.

    Raises:
        FileNotSupportedError: If no supported extension matches.
    """
    file_name = os.path.basename(str(file_path)).lower()

    for ext in sorted(supported_extensions, key=len, reverse=True):
        if file_name.endswith(ext.lower()):
            return ext.lower()

    raise FileNotSupportedError(
        extension=os.path.splitext(file_name)[1],
        supported_extensions=supported_extensions,
        context=f"Rejected file `{os.path.basename(str(file_path))}`."
    )
