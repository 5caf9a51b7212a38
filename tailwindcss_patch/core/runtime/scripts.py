"""Node.js scripts executed through ``NodeBridge``.

Each script reads one JSON payload from stdin and prints one JSON line.
Modules are resolved from the project directory (``payload.cwd``) so the
project's own Tailwind/PostCSS installation is used.
"""

_PRELUDE = r"""
const fs = require('fs');
const path = require('path');
const { createRequire } = require('module');

const payload = JSON.parse(fs.readFileSync(0, 'utf8'));
const requireFromProject = createRequire(path.join(payload.cwd, 'package.json'));

function done(result) {
  process.stdout.write(JSON.stringify(result) + '\n');
}

function fail(error) {
  process.stderr.write(String((error && error.stack) || error) + '\n');
  process.exit(1);
}
"""

# Runs the v2/v3 PostCSS plugin once, then serializes the contexts the
# patched runtime exposes under `payload.refProperty`.
BUILD_SCRIPT = _PRELUDE + r"""
const CONFIG_NAMES = ['tailwind.config.js', 'tailwind.config.cjs', 'tailwind.config.mjs', 'tailwind.config.ts'];

function resolveConfig() {
  if (payload.config) {
    return path.resolve(payload.cwd, payload.config);
  }
  for (const name of CONFIG_NAMES) {
    const candidate = path.join(payload.cwd, name);
    if (fs.existsSync(candidate)) {
      return candidate;
    }
  }
  return undefined;
}

function keys(map) {
  return map && typeof map.keys === 'function' ? Array.from(map.keys(), String) : [];
}

function serializeContexts(runtime) {
  const ref = payload.refProperty ? runtime[payload.refProperty] : undefined;
  const contexts = ref && Array.isArray(ref.value) ? ref.value : [];
  return contexts.filter(Boolean).map((context) => ({
    classCache: keys(context.classCache),
    candidateRuleCache: keys(context.candidateRuleCache),
  }));
}

(async () => {
  const postcss = requireFromProject('postcss');
  const plugin = requireFromProject(payload.postcssPlugin || 'tailwindcss');
  await postcss([plugin(resolveConfig())]).process(
    '@tailwind base;@tailwind components;@tailwind utilities;',
    { from: undefined },
  );
  const entry = payload.majorVersion === 2 ? 'lib/jit/index.js' : 'lib/plugin.js';
  const runtime = require(path.join(payload.packageRoot, entry));
  done({ contexts: serializeContexts(runtime) });
})().catch(fail);
"""

# Keeps the candidates the v4 design system can turn into CSS.
DESIGN_SYSTEM_SCRIPT = _PRELUDE + r"""
(async () => {
  const { __unstable__loadDesignSystem } = requireFromProject('@tailwindcss/node');
  const valid = new Set();
  for (const entry of payload.entries) {
    const designSystem = await __unstable__loadDesignSystem(entry.css, { base: entry.base });
    const css = designSystem.candidatesToCss(payload.candidates);
    css.forEach((value, index) => {
      if (value !== null && value !== undefined) {
        valid.add(payload.candidates[index]);
      }
    });
  }
  done({ classes: Array.from(valid) });
})().catch(fail);
"""
