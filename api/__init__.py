"""HTTP surface for the cloze question editor."""
