"""StorySprout: five-beat interactive children's stories generated and streamed one beat at a time."""
