"""
Motor de sincronizacion one-way: Xero -> espejo local (documentos JSON).

Un solo motor generico parametrizado por EntityTypeConfig, instanciado una vez
por tipo de entidad (accounts, contacts, invoices, ...).

Objetivos de diseño:
- Idempotencia: solo se insertan registros cuyo identificador remoto no existe.
- Sin cursor: el conjunto de IDs existentes se recalcula en cada ciclo.
- Aislamiento de fallos: un registro mal formado no aborta el lote, y un
  ciclo fallido no afecta al siguiente.
"""
