from __future__ import annotations

GCC_STDIO_LOG = (
    ". /usr/include/stdio.h\n"
    ".. /usr/include/features.h\n"
    "... /usr/include/sys/cdefs.h\n"
    ".. /usr/include/bits/types.h\n"
    ". /usr/include/stdlib.h\n"
    "Multiple include guards may be useful for:\n"
    "/usr/include/x.h\n"
)

MSVC_WINDOWS_LOG = (
    "main.cpp\n"
    "Note: including file: C:\\sdk\\windows.h\n"
    "Note: including file:  C:\\sdk\\winbase.h\n"
    "Note: including file: C:\\proj\\a.h\n"
)


def nested_log(width: int, depth: int) -> str:
    """Balanced include tree in dot format; every leaf also re-includes a shared header."""
    lines: list[str] = []

    def _emit(prefix: str, level: int) -> None:
        for index in range(width):
            name = f"{prefix}{index}"
            lines.append(f"{'.' * level} lib/{name}.h")
            if level < depth:
                _emit(f"{name}_", level + 1)
            else:
                lines.append(f"{'.' * (level + 1)} sys/shared.h")

    _emit("h", 1)
    return "\n".join(lines) + "\n"
