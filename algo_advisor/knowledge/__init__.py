"""Knowledge base of weighted recommendation rules."""
