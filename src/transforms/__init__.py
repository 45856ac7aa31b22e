"""Sort and merge-join transforms over record stores."""
