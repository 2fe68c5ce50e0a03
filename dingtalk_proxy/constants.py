import os

# Configurações globais de ambiente
APP_PORT = int(os.getenv("APP_PORT", "9090"))
DEBUG_MODE = os.getenv("DEBUG_MODE", "False").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG_MODE else "INFO").upper()

# O relay interno do DingTalk usa certificado autoassinado; a verificação TLS
# fica desligada por padrão. Trade-off de segurança: ligue em produção.
DINGTALK_VERIFY_TLS = os.getenv("DINGTALK_VERIFY_TLS", "false").lower() == "true"

# Título (markdown ##) exibido no topo de cada relatório
ALERT_REPORT_HEADING = os.getenv("ALERT_REPORT_HEADING", "HCaaS Alert")

# Formato da mensagem de saída
MSG_TYPE = "markdown"
FIRING_STATUS = "firing"
SUCCESS_MESSAGE = "Alert sent successfully"

# Label de commonLabels que identifica o grupo exibido no título
GROUP_ID_LABEL = "group_id"
ALERT_TYPE_LABEL = "alert_type"

GROUP_LABELS = "groupLabels"
COMMON_LABELS = "commonLabels"
