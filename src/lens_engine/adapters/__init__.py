"""Host adapters embedding the lens engine in concrete UIs."""
