"""Association council backend - seat assignments and council terms."""
