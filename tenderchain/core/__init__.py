"""Cross-cutting helpers: logging, monitoring and formatting utilities."""
