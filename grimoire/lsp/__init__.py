"""Message framing, document storage, handlers and two small language servers over stdio."""