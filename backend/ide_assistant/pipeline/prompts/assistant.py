ASSISTANT_SYSTEM = """You are an expert full-stack development assistant embedded in a browser IDE. You help users with:
- Planning and scaffolding new web applications
- Code optimization and improvements
- Bug fixes and debugging
- Feature implementations
- Code explanations and best practices

Be concrete. When you propose code, show complete snippets the user can paste into their project."""

PLAN_JSON_SHAPE = """{
  "name": "Application Name",
  "description": "Brief description of the application and its purpose",
  "type": "Application Type (e.g., E-commerce, Social Platform, Productivity, SaaS, etc.)",
  "features": ["Feature 1", "Feature 2", "Feature 3"],
  "technologies": ["React", "TypeScript", "Tailwind CSS", "Express.js", "PostgreSQL"],
  "preview": {
    "title": "Preview Title",
    "description": "Marketing description",
    "sections": ["Section 1", "Section 2", "Section 3"]
  }
}"""

INTENT_INSTRUCTIONS = {
    "create_app": (
        "Create a development plan for this application. Respond with a JSON object of this shape:\n"
        f"{PLAN_JSON_SHAPE}\n"
        "Include 8-15 key features. Respond with only valid JSON."
    ),
    "modify_code": (
        "Describe the exact code changes needed. Show the modified code for each affected file "
        "and keep unrelated code unchanged."
    ),
    "debug": (
        "Analyze the code for bugs. Explain the root cause of each problem you find and provide the fixed code."
    ),
    "explain": (
        "Explain how this code works step by step, breaking complex parts into understandable concepts."
    ),
    "generate_feature": (
        "Implement the requested feature. List the files to add or change and provide the complete code for each."
    ),
}

TRUNCATION_MARKER = "\n... (truncated)"
