"""Domain types, validation rules and errors for stored records."""
