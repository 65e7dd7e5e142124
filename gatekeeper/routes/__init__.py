"""HTTP routes for the account request pipeline."""
