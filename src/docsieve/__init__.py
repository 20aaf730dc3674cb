"""Section index and ranked search over one Markdown documentation corpus."""
