"""Export of maps to numerical/symbolic backends."""
