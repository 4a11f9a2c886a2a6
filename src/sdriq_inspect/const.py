ERRORS = {
  "E_NO_AUXI": "No auxi chunk found",
  "E_HEADER_SIZE": "auxi chunk does not follow the canonical 36-byte header",
  "E_AUXI_LAYOUT": "auxi chunk is malformed",
  "E_NO_DATA": "data chunk does not follow the auxi chunk",
  "E_IO": "File could not be read",
}
