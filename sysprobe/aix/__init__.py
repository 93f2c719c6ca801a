"""Boot time of IBM AIX hosts from utmp records."""