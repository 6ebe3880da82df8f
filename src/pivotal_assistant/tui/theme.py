"""Pivotal palette and the application stylesheet."""

TEXT_FG = "#F1F0E3"
TEXT_BG = "#464D55"
BORDER_FG = "#666666"
BUTTON_BG = "#213F63"
BUTTON_FOCUS_BG = "#242D50"

CSS = f"""
Screen {{
    background: {TEXT_BG};
    color: {TEXT_FG};
}}

#main {{
    height: 1fr;
}}

StoryPanel {{
    border: solid {BORDER_FG};
    padding: 0 2;
    height: 1fr;
}}

#story-header {{
    height: auto;
    margin-bottom: 1;
}}

#story-title {{
    width: 1fr;
}}

#transition {{
    min-width: 12;
}}

#comment-list {{
    height: 1fr;
}}

.comment {{
    margin-bottom: 1;
}}

#comment-input {{
    dock: bottom;
}}

MessagePanel {{
    border: solid {BORDER_FG};
    padding: 2 4;
    height: 1fr;
    content-align: center middle;
}}

#message {{
    width: 100%;
    text-align: center;
}}

Button {{
    background: {BUTTON_BG};
    color: {TEXT_FG};
}}

Button:focus {{
    background: {BUTTON_FOCUS_BG};
}}

#prompt-dialog, #confirm-dialog {{
    width: 60;
    height: auto;
    border: thick {BORDER_FG};
    background: {TEXT_BG};
    padding: 1 2;
}}

TextPromptModal, ConfirmModal {{
    align: center middle;
}}

#prompt-hint, #confirm-hint {{
    margin-top: 1;
    color: $text-muted;
}}
"""
