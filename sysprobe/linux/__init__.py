"""Host and process information for Linux, read from procfs."""