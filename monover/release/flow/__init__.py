"""Release use-case sequencing."""
