from irctui.app import main

main()
