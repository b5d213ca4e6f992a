from commandy.utils.prompt import build_prompt
from commandy.utils.schema import ContextSnapshot


def _ctx(**kw):
    return ContextSnapshot(**kw)


def test_container_scenario():
    ctx = _ctx(
        environment={"os": "linux", "shell": "bash", "available_tools": "ls,grep,docker"},
        recent_commands=["docker ps -a"],
    )
    out = build_prompt("list running containers", ctx)
    assert "OS: linux" in out
    assert "Shell: bash" in out
    assert "Available executables: ls, grep, docker" in out
    assert "Recent commands: docker" in out
    assert out.count("list running containers") == 2
    assert out.startswith("Generate ONLY valid shell commands for: list running containers")
    assert out.endswith("Commands for: list running containers\n\nCommands:")


def test_deterministic():
    ctx = _ctx(environment={"os": "darwin"}, recent_commands=["git status"], content="a → b")
    assert build_prompt("x", ctx) == build_prompt("x", ctx)


def test_defaults_for_missing_environment():
    out = build_prompt("show disk usage", _ctx())
    assert "OS: unknown" in out
    assert "Shell: unknown" in out
    assert "Available executables: basic" in out
    assert "- Recent commands: \n" in out
    assert "Learned patterns" not in out


def test_tools_truncated_to_twenty():
    tools = ",".join(f"t{i}" for i in range(30))
    out = build_prompt("x", _ctx(environment={"available_tools": tools}))
    line = next(l for l in out.splitlines() if l.startswith("- Available executables:"))
    listed = line.split(": ", 1)[1].split(", ")
    assert listed == [f"t{i}" for i in range(20)]


def test_recent_commands_first_word_of_first_three():
    ctx = _ctx(recent_commands=["git status", "ls -la", "docker ps", "kubectl get pods", "tar xf a.tar"])
    out = build_prompt("x", ctx)
    assert "- Recent commands: git, ls, docker\n" in out
    assert "kubectl" not in out


def test_learned_patterns_filtered_and_capped():
    content = "\n".join(
        [
            "noise line",
            "find big files → du -sh * | sort -h",
            "✓ git log --oneline",
            "another plain line",
            "p3 → a",
            "p4 ✓",
            "p5 → b",
            "p6 → c",
        ]
    )
    out = build_prompt("x", _ctx(content=content))
    section = out.split("Learned patterns:\n", 1)[1]
    lines = section.split("\n\nCommands:")[0].splitlines()
    assert lines == [
        "find big files → du -sh * | sort -h",
        "✓ git log --oneline",
        "p3 → a",
        "p4 ✓",
        "p5 → b",
    ]
    assert "noise line" not in out
    assert out.endswith("\n\nCommands:")


def test_learned_section_omitted_without_markers():
    out = build_prompt("x", _ctx(content="just some text\nnothing marked"))
    assert "Learned patterns" not in out
