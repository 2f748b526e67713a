UNKNOWN_CUSTOMER = "Unknown"
