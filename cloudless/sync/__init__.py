"""Record checksums and key extraction for keeping data in sync with a file."""