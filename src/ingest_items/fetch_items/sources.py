SOURCE_CATALOG = [
    # Framework blogs
    {"name": "React Blog", "kind": "rss", "url": "https://react.dev/blog/rss.xml"},
    {"name": "Next.js Blog", "kind": "rss", "url": "https://nextjs.org/blog/feed.xml"},
    {"name": "Vue.js Blog", "kind": "rss", "url": "https://blog.vuejs.org/feed.xml"},
    {"name": "Angular Blog", "kind": "rss", "url": "https://blog.angular.io/feed"},
    {"name": "Svelte Blog", "kind": "rss", "url": "https://svelte.dev/blog/rss.xml"},
    # Runtimes and browsers
    {"name": "Node.js Blog", "kind": "rss", "url": "https://nodejs.org/en/feed/blog.xml"},
    {"name": "Chrome Releases", "kind": "rss", "url": "https://chromereleases.googleblog.com/feeds/posts/default"},
    {"name": "Firefox Release Notes", "kind": "rss", "url": "https://www.mozilla.org/en-US/firefox/releases/feed.xml"},
    # Cloud changelogs
    {"name": "AWS What's New", "kind": "rss", "url": "https://aws.amazon.com/about-aws/whats-new/recent/feed/"},
    {"name": "Azure Updates", "kind": "rss", "url": "https://azure.microsoft.com/en-us/updates/feed/"},
    {"name": "Google Cloud Release Notes", "kind": "rss", "url": "https://cloud.google.com/feeds/release-notes.xml"},
    {"name": "Vercel Changelog", "kind": "rss", "url": "https://vercel.com/changelog/feed.xml"},
    {"name": "Netlify Changelog", "kind": "rss", "url": "https://www.netlify.com/changelog/feed.xml"},
    # AI
    {"name": "OpenAI Blog", "kind": "rss", "url": "https://openai.com/blog/rss.xml"},
    {"name": "Hugging Face Blog", "kind": "rss", "url": "https://huggingface.co/blog/feed.xml"},
    {"name": "Google AI Blog", "kind": "rss", "url": "https://blog.google/technology/ai/rss/"},
    # Tech news
    {"name": "The Verge", "kind": "rss", "url": "https://www.theverge.com/rss/index.xml"},
    {"name": "Ars Technica", "kind": "rss", "url": "https://feeds.arstechnica.com/arstechnica/technology-lab"},
    {"name": "Engadget", "kind": "rss", "url": "https://www.engadget.com/rss.xml"},
    # Databases
    {"name": "Redis Blog", "kind": "rss", "url": "https://redis.io/blog/feed/"},
    # GitHub releases
    {"name": "React GitHub", "kind": "github", "url": "facebook/react"},
    {"name": "Next.js GitHub", "kind": "github", "url": "vercel/next.js"},
    {"name": "Vue GitHub", "kind": "github", "url": "vuejs/core"},
    {"name": "Angular GitHub", "kind": "github", "url": "angular/angular"},
    {"name": "Node.js GitHub", "kind": "github", "url": "nodejs/node"},
    {"name": "TypeScript GitHub", "kind": "github", "url": "microsoft/TypeScript"},
    {"name": "Vite GitHub", "kind": "github", "url": "vitejs/vite"},
    {"name": "Bun GitHub", "kind": "github", "url": "oven-sh/bun"},
    {"name": "Deno GitHub", "kind": "github", "url": "denoland/deno"},
    # npm registry
    {"name": "TypeScript npm", "kind": "registry", "url": "typescript"},
    {"name": "Vite npm", "kind": "registry", "url": "vite"},
]

# Historically reliable, low-latency sources for the time-boxed fast run
FAST_SOURCE_NAMES = frozenset({
    "The Verge",
    "Ars Technica",
    "Engadget",
    "OpenAI Blog",
    "React GitHub",
    "Next.js GitHub",
    "Vue GitHub",
    "TypeScript GitHub",
})
