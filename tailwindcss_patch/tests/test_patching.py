"""Tests for runtime patches applied to an installed Tailwind package."""

import logging
import os

import pytest

from tailwindcss_patch.core.errors import PatchApplicationError
from tailwindcss_patch.core.options import normalize_options
from tailwindcss_patch.core.packages import get_package_info_sync
from tailwindcss_patch.core.patching import apply_tailwind_patches, select_patches
from tailwindcss_patch.core.patching.patches import existing_length_units, extend_length_units_patch


# =========================================================================
# Sample runtime files
# =========================================================================

PROCESS_FEATURES_JS = '''"use strict";
Object.defineProperty(exports, "__esModule", {
    value: true
});
function processTailwindFeatures(setupContext) {
    return async function(root, result) {
        let { tailwindDirectives , applyDirectives  } = (0, _normalizeTailwindDirectives.default)(root);
        let context = setupContext({ tailwindDirectives, applyDirectives });
        (0, _expandTailwindAtRules.default)(context)(root, result);
        (0, _collapseDeclarations.default)(context)(root, result);
    };
}
'''

PLUGIN_JS = '''"use strict";
const _processTailwindFeatures = /*#__PURE__*/ _interop_require_default(require("./processTailwindFeatures"));
module.exports = function tailwindcss(configOrPath) {
    return {
        postcssPlugin: "tailwindcss",
        plugins: [
            async function(root, result) {
                await (0, _processTailwindFeatures.default)((context)=>{
                    return (0, _setupTrackingContext.default)(configOrPath);
                })(root, result);
            }
        ].filter(Boolean)
    };
};
module.exports.postcss = true;
'''

DATA_TYPES_JS = '''"use strict";
let lengthUnits = [
    "cm",
    "mm",
    "px",
    "rem"
];
let lengthUnitsPattern = `(?:${lengthUnits.join("|")})`;
'''

V3_FILES = {
    "lib/processTailwindFeatures.js": PROCESS_FEATURES_JS,
    "lib/plugin.js": PLUGIN_JS,
    "lib/util/dataTypes.js": DATA_TYPES_JS,
}

V2_FILES = {
    "lib/jit/processTailwindFeatures.js": PROCESS_FEATURES_JS,
    "lib/jit/index.js": PLUGIN_JS,
}


def _setup(tmp_path, package_factory, version="3.4.1", files=None, **options):
    package_factory(tmp_path, version=version, files=V3_FILES if files is None else files)
    info = get_package_info_sync("tailwindcss", [str(tmp_path)])
    return info, normalize_options({"cwd": str(tmp_path), **options})


def _read(info, relative_path):
    with open(os.path.join(info.root_path, relative_path), encoding="utf-8") as f:
        return f.read()


# =========================================================================
# Context exposure
# =========================================================================


class TestExposeContext:
    def test_v3_patched(self, tmp_path, package_factory):
        info, options = _setup(tmp_path, package_factory)
        report = apply_tailwind_patches(info, options, 3)

        assert report.applied == ["return-context", "expose-context"]
        assert len(report.files_written) == 2

        process = _read(info, "lib/processTailwindFeatures.js")
        assert "(0, _collapseDeclarations.default)(context)(root, result);\n        return context;" in process

        plugin = _read(info, "lib/plugin.js")
        assert plugin.startswith('"use strict";\n/* tailwindcss-patch:expose-context */')
        assert "await (0, __twPatchTrack(_processTailwindFeatures.default))((context)=>{" in plugin
        assert plugin.rstrip().endswith('module.exports["contextRef"] = __twPatchContextRef;')

    def test_idempotent(self, tmp_path, package_factory):
        info, options = _setup(tmp_path, package_factory)
        apply_tailwind_patches(info, options, 3)
        first = _read(info, "lib/plugin.js"), _read(info, "lib/processTailwindFeatures.js")

        report = apply_tailwind_patches(info, options, 3)

        assert report.applied == []
        assert report.files_written == []
        assert {r.status for r in report.results} == {"already-applied"}
        assert (_read(info, "lib/plugin.js"), _read(info, "lib/processTailwindFeatures.js")) == first

    def test_dry_run_without_overwrite(self, tmp_path, package_factory):
        info, options = _setup(tmp_path, package_factory, overwrite=False)
        report = apply_tailwind_patches(info, options, 3)

        assert report.pending == ["return-context", "expose-context"]
        assert report.files_written == []
        assert _read(info, "lib/plugin.js") == PLUGIN_JS

    def test_v2_files(self, tmp_path, package_factory):
        info, options = _setup(tmp_path, package_factory, version="2.2.19", files=V2_FILES)
        report = apply_tailwind_patches(info, options, 2)

        assert sorted(os.path.relpath(path, info.root_path) for path in report.files_written) == [
            os.path.join("lib", "jit", "index.js"),
            os.path.join("lib", "jit", "processTailwindFeatures.js"),
        ]
        assert "__twPatchContextRef" in _read(info, "lib/jit/index.js")

    def test_custom_ref_property(self, tmp_path, package_factory):
        info, options = _setup(
            tmp_path, package_factory, features={"expose_context": {"ref_property": "runtimeContexts"}}
        )
        apply_tailwind_patches(info, options, 3)
        assert 'module.exports["runtimeContexts"] = __twPatchContextRef;' in _read(info, "lib/plugin.js")

    def test_disabled(self, tmp_path, package_factory):
        info, options = _setup(tmp_path, package_factory, features={"expose_context": False})
        assert select_patches(options, 3) == []
        assert apply_tailwind_patches(info, options, 3).results == []

    def test_missing_file(self, tmp_path, package_factory):
        info, options = _setup(tmp_path, package_factory, files={"lib/plugin.js": PLUGIN_JS})
        with pytest.raises(PatchApplicationError):
            apply_tailwind_patches(info, options, 3)

    def test_missing_anchor(self, tmp_path, package_factory):
        files = dict(V3_FILES)
        files["lib/processTailwindFeatures.js"] = '"use strict";\nmodule.exports = {};\n'
        info, options = _setup(tmp_path, package_factory, files=files)
        with pytest.raises(PatchApplicationError) as excinfo:
            apply_tailwind_patches(info, options, 3)
        assert "anchor not found" in str(excinfo.value)


# =========================================================================
# Length units
# =========================================================================


class TestExtendLengthUnits:
    def test_units_added(self, tmp_path, package_factory):
        info, options = _setup(
            tmp_path, package_factory,
            features={"expose_context": False, "extend_length_units": {"units": ["rpx", "vmin2"]}},
        )
        report = apply_tailwind_patches(info, options, 3)

        assert report.applied == ["extend-length-units"]
        content = _read(info, "lib/util/dataTypes.js")
        assert existing_length_units(content) == ["cm", "mm", "px", "rem", "rpx", "vmin2"]
        assert "let lengthUnitsPattern" in content

    def test_idempotent(self, tmp_path, package_factory):
        info, options = _setup(
            tmp_path, package_factory, features={"expose_context": False, "extend_length_units": True}
        )
        apply_tailwind_patches(info, options, 3)
        content = _read(info, "lib/util/dataTypes.js")

        report = apply_tailwind_patches(info, options, 3)
        assert report.applied == []
        assert _read(info, "lib/util/dataTypes.js") == content
        assert existing_length_units(content).count("rpx") == 1

    def test_present_unit_not_duplicated(self):
        patched = extend_length_units_patch(["px"]).apply(DATA_TYPES_JS)
        assert existing_length_units(patched) == ["cm", "mm", "px", "rem"]

    def test_not_supported_on_v4(self, tmp_path, package_factory, caplog):
        info, options = _setup(
            tmp_path, package_factory, version="4.0.0", features={"extend_length_units": True}
        )
        with caplog.at_level(logging.WARNING):
            report = apply_tailwind_patches(info, options, 4)

        assert report.results == []
        assert "not supported for Tailwind CSS v4" in caplog.text
