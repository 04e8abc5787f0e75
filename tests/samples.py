# flake8: noqa
# Mensajes .upl de ejemplo (IH-1000, banco de sangre)

BOTH = (
    "H|\\^&|||IH-1000|||||||LIS2|A2||20240101093000\n"
    "P|1||REQ123|||DOE^JOHN\n"
    "O|1||S1|ABD|R|20240101100000\n"
    "R|1|^^^Result^AB1^Ab.screening|\n"
    "R|2|^^^Result^CN15B^Screening cell I|^^Negative^^|\n"
    "R|3|^^^Result^BG2^Bloodgroup|\n"
    "R|4|^^^Result^MO31X^ABO/D|A^Pos^|\n"
    "L|1|N\n"
)

# Solo anticuerpos, sin trama CN15B
AB_NO_RESULT = (
    "P|1||REQ123|\n"
    "H|x||20240101093000\n"
    "O|1||a|b|c|20240101100000\n"
    "R|1|^^^Result^AB1^Ab.screening|\n"
)

BLOODGROUP_ONLY = (
    "H|\\^&|||IH-1000|||||||LIS2|A2||20240202120000\n"
    "P|1||REQ777|\n"
    "O|1||S9|ABD|R|20240202121500\n"
    "R|1|^^^Result^BG2^Bloodgroup|\n"
    "R|2|^^^Result^MO31X^x|A^B^\n"
)

BLOODGROUP_NO_RESULT = "P|1||REQ9|\nR|1|^^^Result^BG7^Bloodgroup|\n"

HEADER_ONLY = (
    "H|\\^&|||IH-1000|||||||LIS2|A2||20240303080000\n"
    "P|1||REQ555|\n"
    "O|1||S3|QC|R|20240303081000\n"
    "L|1|N\n"
)

GARBLED = "\x00\x01 not an analyzer file ^^|| Result^ ^Ab.screening"
