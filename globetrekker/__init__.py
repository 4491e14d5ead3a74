"""GlobeTrekker travel-site backend: newsletter, contact relay, accounts and trip registrations."""
