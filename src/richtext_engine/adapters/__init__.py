"""Host adapters that embed the engine into concrete UI toolkits."""
