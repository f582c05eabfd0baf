"""ZingCab cab booking API: contact intake, fare estimates and bookings."""
