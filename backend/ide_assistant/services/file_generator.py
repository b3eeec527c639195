import json
import re
from typing import Protocol

from ide_assistant.schemas.pipeline import ApplicationPlan, GeneratedFile, GenerationRequest, GenerationResult


class FileGenerator(Protocol):
    """Produces project files for an approved plan."""

    async def generate(self, request: GenerationRequest) -> GenerationResult: ...


# technology keyword -> npm packages added to the generated package.json
_TECH_PACKAGES = {
    "react": {"react": "^18.2.0", "react-dom": "^18.2.0"},
    "express": {"express": "^4.18.2", "cors": "^2.8.5"},
    "postgresql": {"pg": "^8.11.3"},
    "mongodb": {"mongodb": "^6.3.0"},
    "stripe": {"stripe": "^14.10.0"},
    "jwt": {"jsonwebtoken": "^9.0.2"},
    "redis": {"redis": "^4.6.12"},
    "websocket": {"ws": "^8.16.0"},
}


def _slugify(name: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
    return slug or "generated-app"


def _has_feature(plan: ApplicationPlan, phrase: str) -> bool:
    return any(phrase in f.lower() for f in plan.features)


def render_app_tsx(name: str, description: str) -> str:
    return f"""// {name} - React Application
import React from 'react';

function App() {{
  return (
    <div className="min-h-screen bg-gray-50">
      <header className="bg-white shadow">
        <h1 className="text-2xl font-bold p-4">{name}</h1>
      </header>
      <main className="container mx-auto p-4">
        <p className="text-gray-600">{description}</p>
      </main>
    </div>
  );
}}

export default App;
"""


def render_server_ts(name: str) -> str:
    return f"""// {name} - Express Server
import express from 'express';
import cors from 'cors';

const app = express();
const PORT = process.env.PORT || 5000;

app.use(cors());
app.use(express.json());

app.get('/api/health', (req, res) => {{
  res.json({{ status: 'OK', service: {json.dumps(name)} }});
}});

app.listen(PORT, () => {{
  console.log(`{name} server running on port ${{PORT}}`);
}});
"""


def render_schema_sql(plan: ApplicationPlan) -> str:
    parts = [
        f"-- {plan.name} Database Schema",
        f"-- Generated for {plan.type}",
        "",
        "CREATE TABLE users (",
        "  id SERIAL PRIMARY KEY,",
        "  email VARCHAR(255) UNIQUE NOT NULL,",
        "  password_hash VARCHAR(255) NOT NULL,",
        "  created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP",
        ");",
    ]
    has_products = _has_feature(plan, "product catalog")
    if has_products:
        parts += [
            "",
            "CREATE TABLE products (",
            "  id SERIAL PRIMARY KEY,",
            "  name VARCHAR(255) NOT NULL,",
            "  description TEXT,",
            "  price DECIMAL(10,2),",
            "  created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP",
            ");",
        ]
    if has_products and _has_feature(plan, "shopping cart"):
        parts += [
            "",
            "CREATE TABLE cart_items (",
            "  id SERIAL PRIMARY KEY,",
            "  user_id INTEGER REFERENCES users(id),",
            "  product_id INTEGER REFERENCES products(id),",
            "  quantity INTEGER DEFAULT 1",
            ");",
        ]
    return "\n".join(parts) + "\n"


def render_package_json(name: str, technologies: list[str]) -> str:
    deps: dict[str, str] = {}
    joined = " ".join(technologies).lower()
    for keyword, packages in _TECH_PACKAGES.items():
        if keyword in joined:
            deps.update(packages)
    manifest = {
        "name": _slugify(name),
        "version": "0.1.0",
        "private": True,
        "scripts": {"dev": "vite", "build": "vite build", "server": "tsx server/server.ts"},
        "dependencies": dict(sorted(deps.items())),
        "devDependencies": {"typescript": "^5.3.3", "vite": "^5.0.10", "tsx": "^4.7.0"},
    }
    return json.dumps(manifest, indent=2) + "\n"


class TemplateFileGenerator:
    """String-template scaffolding. Deterministic, no network."""

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        plan = request.plan
        name = plan.name if plan else "Generated App"
        description = request.description
        technologies = plan.technologies if plan else []

        files = [
            GeneratedFile(name="App.tsx", path="/src/App.tsx",
                          content=render_app_tsx(name, description), language="typescript"),
            GeneratedFile(name="server.ts", path="/server/server.ts",
                          content=render_server_ts(name), language="typescript"),
            GeneratedFile(name="package.json", path="/package.json",
                          content=render_package_json(name, technologies), language="json"),
        ]
        if plan:
            files.append(GeneratedFile(name="schema.sql", path="/database/schema.sql",
                                       content=render_schema_sql(plan), language="sql"))

        return GenerationResult(files=files, message=f"Successfully built {name}!")
