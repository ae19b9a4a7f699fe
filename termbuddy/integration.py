"""
Shell integration snippets.

Typing ``::`` followed by a request and pressing the bound key replaces the
line with the generated command, ready to review and run.
"""

from pathlib import Path
from typing import Dict, Optional

MARKER = "# TermBuddy - AI terminal assistant integration"

ZSH_SNIPPET = MARKER + r'''
function termbuddy-command() {
    local text="$BUFFER"
    if [[ $text == ::* ]]; then
        text="${text#::}"
        text="${text# }"

        BUFFER="Thinking..."
        CURSOR=$#BUFFER
        zle redisplay

        local command=$(termbuddy "$text" 2>&1)

        BUFFER="$command"
        CURSOR=$#BUFFER
        zle redisplay
    else
        zle accept-line
    fi
}
zle -N termbuddy-command
bindkey '^M' termbuddy-command
'''

BASH_SNIPPET = MARKER + r'''
__termbuddy_expand() {
    if [[ $READLINE_LINE == ::* ]]; then
        local text="${READLINE_LINE#::}"
        text="${text# }"
        local command
        command=$(termbuddy "$text" 2>&1)
        READLINE_LINE="$command"
        READLINE_POINT=${#READLINE_LINE}
    fi
}
bind -x '"\C-g": __termbuddy_expand'
'''

FISH_SNIPPET = MARKER + r'''
function __termbuddy_expand
    set -l text (commandline)
    if string match -q -- '::*' $text
        set text (string replace -r '^::\s?' '' -- $text)
        set -l command (termbuddy "$text" 2>&1 | string collect)
        commandline -r -- $command
        commandline -f repaint
    else
        commandline -f execute
    end
end
bind \r __termbuddy_expand
'''

SNIPPETS: Dict[str, str] = {
    "zsh": ZSH_SNIPPET,
    "bash": BASH_SNIPPET,
    "fish": FISH_SNIPPET,
}

RC_FILES: Dict[str, Path] = {
    "zsh": Path(".zshrc"),
    "bash": Path(".bashrc"),
    "fish": Path(".config") / "fish" / "config.fish",
}


def detect_shell(shell_path: Optional[str]) -> Optional[str]:
    """Map $SHELL to a supported shell name"""
    if not shell_path:
        return None
    name = Path(shell_path).name
    for shell in SNIPPETS:
        if shell in name:
            return shell
    return None


def get_snippet(shell: str) -> str:
    try:
        return SNIPPETS[shell]
    except KeyError:
        raise ValueError(f"Unsupported shell: {shell}") from None


def rc_file_for(shell: str, home: Optional[Path] = None) -> Path:
    return (home or Path.home()) / RC_FILES[shell]


def install_integration(shell: str, rc_file: Path) -> bool:
    """Append the snippet once; returns False if it was already present"""
    snippet = get_snippet(shell)

    if rc_file.exists():
        if MARKER in rc_file.read_text():
            return False
        with open(rc_file, 'a') as f:
            f.write("\n" + snippet)
    else:
        rc_file.parent.mkdir(parents=True, exist_ok=True)
        rc_file.write_text(snippet)

    return True
