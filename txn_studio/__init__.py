"""Transaction recording and replay core for the flow studio."""
