"""Application logic for notex: key events, line editor, task operations,
undo history and the state machine that ties them together."""
