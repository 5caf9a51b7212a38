"""Text patches applied to the installed Tailwind runtime.

Each patch targets one file of the package, locates an anchor with a regex
and rewrites it. A marker comment identifies patched code so that applying
twice is a no-op.
"""

import json
import re
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..errors import PatchApplicationError

MARKER_PREFIX = "tailwindcss-patch:"


@dataclass
class TextPatch:
    """One anchored rewrite of a runtime file.

    Attributes:
        name: Identifier used in reports and logs
        relative_path: File path relative to the package root
        marker: Text present in the file once the patch is applied
        search_regex: Anchor the patch rewrites; must match
        rewrite: Builds the new file content from the content and anchor match
    """

    name: str
    relative_path: str
    marker: str
    search_regex: str
    rewrite: Callable[[str, "re.Match"], str]

    def is_applied(self, content: str) -> bool:
        return self.marker in content

    def apply(self, content: str) -> Optional[str]:
        """Return the patched content, or None when already applied.

        Raises:
            PatchApplicationError: The anchor is not present
        """
        if self.is_applied(content):
            return None
        match = re.search(self.search_regex, content, re.MULTILINE)
        if not match:
            raise PatchApplicationError(
                f"Cannot apply {self.name}: anchor not found in {self.relative_path}"
            )
        return self.rewrite(content, match)


def _marker(name: str) -> str:
    return f"/* {MARKER_PREFIX}{name} */"


def _insert_after_use_strict(content: str, snippet: str) -> str:
    match = re.match(r"""\s*(["'])use strict\1;?[ \t]*\n?""", content)
    if match:
        return content[:match.end()] + snippet + content[match.end():]
    return snippet + content


# =========================================================================
# Context exposure (v2, v3)
# =========================================================================

_COLLAPSE_DECLARATIONS_RE = r"\(0,\s*_collapseDeclarations\.default\)\(context\)\(root,\s*result\);?"
_PROCESS_FEATURES_CALL_RE = r"\(0,\s*_processTailwindFeatures\.default\)\("


def return_context_patch(relative_path: str) -> TextPatch:
    """Make ``processTailwindFeatures`` return the context it built."""
    marker = _marker("return-context")

    def rewrite(content, match):
        statement = match.group(0)
        if not statement.endswith(";"):
            statement += ";"
        return (
            content[:match.start()]
            + f"{statement}\n        return context; {marker}"
            + content[match.end():]
        )

    return TextPatch(
        name="return-context",
        relative_path=relative_path,
        marker=marker,
        search_regex=_COLLAPSE_DECLARATIONS_RE,
        rewrite=rewrite,
    )


def expose_context_patch(relative_path: str, ref_property: str) -> TextPatch:
    """Collect every context the plugin builds into ``module.exports[ref_property]``.

    The ``processTailwindFeatures`` call is wrapped so its (possibly async)
    result is pushed onto a shared ``{ value: [] }`` reference.
    """
    marker = _marker("expose-context")
    prelude = (
        f"{marker}\n"
        "const __twPatchContextRef = { value: [] };\n"
        "function __twPatchTrack(processTailwindFeatures) {\n"
        "  return (...args) => {\n"
        "    const run = processTailwindFeatures(...args);\n"
        "    return (root, result) => {\n"
        "      const context = run(root, result);\n"
        "      if (context && typeof context.then === 'function') {\n"
        "        return context.then((resolved) => {\n"
        "          __twPatchContextRef.value.push(resolved);\n"
        "          return resolved;\n"
        "        });\n"
        "      }\n"
        "      __twPatchContextRef.value.push(context);\n"
        "      return context;\n"
        "    };\n"
        "  };\n"
        "}\n"
    )
    export = f"\nmodule.exports[{json.dumps(ref_property)}] = __twPatchContextRef;\n"

    def rewrite(content, match):
        wrapped = (
            content[:match.start()]
            + "(0, __twPatchTrack(_processTailwindFeatures.default))("
            + content[match.end():]
        )
        return _insert_after_use_strict(wrapped, prelude) + export

    return TextPatch(
        name="expose-context",
        relative_path=relative_path,
        marker=marker,
        search_regex=_PROCESS_FEATURES_CALL_RE,
        rewrite=rewrite,
    )


# =========================================================================
# Length units (v3)
# =========================================================================

_LENGTH_UNITS_RE = r"((?:let|const|var)\s+lengthUnits\s*=\s*\[)([^\]]*)(\])"
_QUOTED_RE = re.compile(r"""(["'])([^"']*)\1""")


def existing_length_units(content: str) -> List[str]:
    match = re.search(_LENGTH_UNITS_RE, content)
    if not match:
        return []
    return [m.group(2) for m in _QUOTED_RE.finditer(match.group(2))]


def extend_length_units_patch(units: List[str], relative_path: str = "lib/util/dataTypes.js") -> TextPatch:
    """Append ``units`` to the ``lengthUnits`` array used to validate lengths.

    The marker lists the units so a changed unit list is detected as
    not yet applied.
    """
    marker = _marker("length-units=" + ",".join(units))

    def rewrite(content, match):
        present = [m.group(2) for m in _QUOTED_RE.finditer(match.group(2))]
        missing = [unit for unit in units if unit not in present]
        body = match.group(2).rstrip()
        if missing:
            separator = "," if body and not body.endswith(",") else ""
            body += separator + "".join(f"\n    {json.dumps(unit)}," for unit in missing) + "\n"
        return (
            content[:match.start()]
            + match.group(1) + body + match.group(3)
            + f" {marker}"
            + content[match.end():]
        )

    return TextPatch(
        name="extend-length-units",
        relative_path=relative_path,
        marker=marker,
        search_regex=_LENGTH_UNITS_RE,
        rewrite=rewrite,
    )
