"""Host integrations for the editor core."""
