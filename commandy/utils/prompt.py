from typing import List

from .schema import ContextSnapshot

MAX_TOOLS = 20
MAX_RECENT = 3
MAX_PATTERNS = 5
PATTERN_MARKERS = ("→", "✓")

TEMPLATE = """Generate ONLY valid shell commands for: {request}

System Information:
- OS: {os}
- Shell: {shell}
- Available executables: {tools}
- Recent commands: {recent}

CRITICAL REQUIREMENTS:
1. Commands MUST use only executables that exist in PATH
2. Start with real command names, not pseudo-commands
3. Use proper shell syntax
4. Be directly executable
5. Provide safe, practical solutions

Output format: Return 1-3 shell commands, each on a new line.
Example format:
docker ps -a
ls -la /var/log
grep -r "error" /var/log/

Commands for: {request}"""


def _learned_patterns(content: str) -> List[str]:
    hits = [line for line in content.splitlines() if any(m in line for m in PATTERN_MARKERS)]
    return hits[:MAX_PATTERNS]


def build_prompt(user_prompt: str, context: ContextSnapshot) -> str:
    env = context.environment
    # Truncation keeps the context from crowding out the request
    tools = env.get("available_tools")
    tools = ", ".join(tools.split(",")[:MAX_TOOLS]) if tools is not None else "basic"
    recent = [c.split()[0] for c in context.recent_commands[:MAX_RECENT] if c.split()]

    prompt = TEMPLATE.format(
        request=user_prompt,
        os=env.get("os", "unknown"),
        shell=env.get("shell", "unknown"),
        tools=tools,
        recent=", ".join(recent),
    )

    if context.content:
        patterns = _learned_patterns(context.content)
        if patterns:
            prompt += "\n\nLearned patterns:\n" + "\n".join(patterns)

    return prompt + "\n\nCommands:"
