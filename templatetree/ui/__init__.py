"""Qt widgets of TemplateTree."""
