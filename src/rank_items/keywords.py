"""Relevance vocabulary and signal patterns shared by ranking, selection and facts packs."""

import re

RELEVANT_KEYWORDS = (
    # Frameworks
    "react", "nextjs", "next.js", "vue", "angular", "svelte", "nuxt", "vite", "bun", "deno",
    # Languages
    "typescript", "javascript", "nodejs", "node.js", "python", "rust", "go",
    # AI/ML
    "ai", "artificial intelligence", "machine learning", "ml", "openai", "gemini", "claude",
    # Cloud & Infrastructure
    "aws", "azure", "gcp", "google cloud", "vercel", "netlify", "docker", "kubernetes",
    # Databases
    "postgresql", "mysql", "redis", "mongodb", "elasticsearch",
    # Tools & Libraries
    "webpack", "rollup", "esbuild", "swc", "tailwind", "bootstrap",
    # Release lifecycle
    "release", "update", "version", "changelog", "breaking", "migration",
)

FRAMEWORK_NAMES = (
    "react", "nextjs", "vue", "angular", "svelte", "nodejs", "typescript",
    "javascript", "python", "rust", "go",
)

RELEASE_TYPE_WORDS = ("release", "update", "breaking", "security")

RELEASE_WORDS = ("release", "released", "releases", "version", "changelog")
BREAKING_WORDS = ("breaking", "migration")
SECURITY_WORDS = ("security", "vulnerability", "vulnerabilities", "cve")
PERFORMANCE_WORDS = ("performance", "faster", "optimization", "optimizations")
NEW_FEATURE_WORDS = ("new feature", "new features", "introducing", "added")

# Ecosystem label for facts packs, keyed by the terms that signal it
ECOSYSTEMS = (
    (("react",), "React ecosystem"),
    (("node", "nodejs", "node.js"), "Node.js ecosystem"),
    (("typescript",), "TypeScript ecosystem"),
    (("vue",), "Vue ecosystem"),
    (("angular",), "Angular ecosystem"),
    (("svelte",), "Svelte ecosystem"),
    (("python",), "Python ecosystem"),
    (("rust",), "Rust ecosystem"),
    (("kubernetes",), "Kubernetes ecosystem"),
)

SHORT_VERSION_PATTERN = re.compile(r"(?<![\w.])v\d+\.\d+")
MAJOR_VERSION_PATTERN = re.compile(r"(?<![\w.])v?\d+\.0\.0(?!\.?\d)")
SEMVER_PATTERN = re.compile(r"v?(\d+\.\d+\.\d+)")
